"""courier: a small HTTP request helper with bounded retries."""
