from downloader_api.main import run

run()
