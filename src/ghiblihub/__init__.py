"""GhibliHub: where to watch Studio Ghibli films, by region."""
