"""Services implementing discovery, backup, patching and orchestration."""
