from bucketlog._interface.cli import app

app()
