"""Recipe Finder API."""
