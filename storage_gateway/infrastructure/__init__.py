"""Infrastructure: storage backends and their exceptions."""
