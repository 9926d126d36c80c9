"""Pattern lists and HAR traffic log storage."""
