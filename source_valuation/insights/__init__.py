"""Key-takeaway generation over classified sources."""
