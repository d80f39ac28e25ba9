"""Istanbul bazaar business directory backend."""
