"""Load secrets from a CSV file into a cloud secret manager."""
