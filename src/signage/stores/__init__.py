"""Store registry: identifiers, creation and listing."""
