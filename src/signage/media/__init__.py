"""Upload, delete and listing of store and common media."""
