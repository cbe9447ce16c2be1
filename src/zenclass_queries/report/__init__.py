"""The fixed battery of questions and their console rendering."""
