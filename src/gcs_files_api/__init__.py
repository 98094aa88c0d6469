"""Upload, list and delete files in a Google Cloud Storage bucket over HTTP."""
