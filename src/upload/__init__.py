"""Upload stage: changed snippet files to the ingestion endpoint."""
