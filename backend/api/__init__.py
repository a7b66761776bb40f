"""HTTP transport for the review social backend."""
