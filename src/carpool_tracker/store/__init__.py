"""In-memory store: the address book and the filtered model built on it."""
