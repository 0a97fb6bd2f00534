"""Services used by the merge workflow."""
