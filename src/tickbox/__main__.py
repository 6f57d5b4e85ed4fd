from tickbox.cli import app

app()
