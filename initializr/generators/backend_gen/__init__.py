"""Go backend generation."""
