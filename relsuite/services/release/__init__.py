"""Release drafting: version, changelog, notes and the GitHub draft."""
