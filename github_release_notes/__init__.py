"""Generates categorized, attributed release notes from GitHub commit history."""
