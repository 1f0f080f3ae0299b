"""Application fixtures used by the tests: models, migrations, seeds, policies and settings."""
