"""Small helpers shared by the routes and DAOs."""
