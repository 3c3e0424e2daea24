"""HTTP runtime: authentication, flash messages and the generated routes."""
