"""Challenges feature: solo skill challenges and attempt recording."""
