"""Pipeline stages: discovery, status extraction, tree building and display."""
