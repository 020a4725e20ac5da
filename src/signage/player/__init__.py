"""Read-only routes consumed by TV players, including legacy aliases."""
