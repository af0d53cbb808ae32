"""Small shared helpers (subprocess, logging)."""
