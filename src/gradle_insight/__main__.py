"""Allow ``python -m gradle_insight``."""

from .cli import app

app(prog_name="gradle-insight")
