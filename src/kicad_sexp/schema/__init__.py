"""Shape schemas and the structural matcher that interprets them."""
