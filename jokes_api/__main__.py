from jokes_api.server import run

run()
