"""Bible text resolution for the church daily reading plan."""
