"""Core building blocks of the account client."""
