"""Right-side metadata and generated playlist documents."""
