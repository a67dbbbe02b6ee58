"""S3 object storage for uploaded design assets."""
