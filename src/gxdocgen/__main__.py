from gxdocgen.cli import app

app(prog_name="gxdocgen")
