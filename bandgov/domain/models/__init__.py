"""Domain models for proposals, votes, memberships and nominations."""
