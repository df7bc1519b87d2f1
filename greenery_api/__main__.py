from greenery_api.main import run

run()
