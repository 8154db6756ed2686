from branchtime.cli import app

app(prog_name="branchtime")
