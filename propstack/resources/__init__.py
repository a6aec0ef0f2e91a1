"""Default property resources bundled with propstack."""
