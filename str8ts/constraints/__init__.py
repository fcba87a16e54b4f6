"""Variable indexing, constraint plumbing and the Str8ts encoding."""
