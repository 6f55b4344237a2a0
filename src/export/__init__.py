"""Export stage: Notion pages to local snippet files."""
