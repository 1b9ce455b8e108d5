"""CLI tools for atlasExport.

- ``python -m atlas_export.cli.export jira`` - export Jira projects and issues
- ``python -m atlas_export.cli.export confluence`` - export Confluence spaces
  and pages

Both print the export summary as JSON on stdout; log lines go to stderr.
"""
