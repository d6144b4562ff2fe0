from logverdict.cli.main import app

app()
