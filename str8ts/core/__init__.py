"""Grid model and puzzle file formats."""
