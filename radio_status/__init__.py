"""radio status - normalized now-playing status for Shoutcast/Icecast servers."""
