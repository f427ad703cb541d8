"""Django applications of the rental back office."""
