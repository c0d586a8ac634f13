"""Student Practice API: user registration and login over a single users table."""
