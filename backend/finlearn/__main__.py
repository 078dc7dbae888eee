from finlearn.main import run

run()
