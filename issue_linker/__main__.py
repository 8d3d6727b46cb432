from issue_linker.cli import app

app()
