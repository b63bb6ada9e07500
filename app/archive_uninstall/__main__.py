"""Allow running as ``python -m archive_uninstall``."""

from archive_uninstall.cli.main import app

app()
