from ai_cz.cli.main import run

run()
