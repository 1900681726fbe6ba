"""HTML rendering: markdown bodies, page shells and repeated list fragments."""
