"""Domain layer - rows, pages and the page-addressed table."""
