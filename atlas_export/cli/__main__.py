"""Allow ``python -m atlas_export.cli`` execution."""

from atlas_export.cli.export import main

main()
