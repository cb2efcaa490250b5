"""Browser artifacts: Edge favorites from the Chromium ``Bookmarks`` JSON file."""
