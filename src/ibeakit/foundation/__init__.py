"""Foundation layer: solutions, problems, dominance utilities and errors."""
