"""Rankings feature: venue, city and country leaderboards."""
