"""Response handlers: map CommandResult objects to typed summaries."""
