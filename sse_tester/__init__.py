"""Connection testing for Server-Sent Events sources."""
