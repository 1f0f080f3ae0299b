"""Database migrations and seeding command."""

import logging

from whoa.data.migrations import FileMigrationRunner, FileSeedRunner
from whoa.data.settings import DataSettings
from whoa.settings import InstanceSettingsProvider
from .base import Command
from .io import CommandIO

logger = logging.getLogger(__name__)


class DataCommand(Command):
    """Runs migrations, rolls them back or seeds the database."""

    NAME = "w:db"
    DESCRIPTION = "Migrates and seeds application database."
    HELP = "Applies new migrations, rolls back applied ones or runs seeds."

    ARG_ACTION = "action"
    ACTION_MIGRATE = "migrate"
    ACTION_ROLLBACK = "rollback"
    ACTION_SEED = "seed"

    OPT_PATH = "path"

    @classmethod
    def get_arguments(cls):
        return [
            {
                "name": cls.ARG_ACTION,
                "description": f"Action such as `{cls.ACTION_MIGRATE}`, `{cls.ACTION_ROLLBACK}` or `{cls.ACTION_SEED}`.",
                "required": True,
            },
        ]

    @classmethod
    def get_options(cls):
        return [
            {
                "name": cls.OPT_PATH,
                "shortcut": "i",
                "description": "Path to a list of migrations or seeds. "
                               "If not given a value from settings will be used.",
                "has_value": True,
            },
        ]

    @classmethod
    def execute(cls, container, io: CommandIO):
        action = io.get_argument(cls.ARG_ACTION)
        path = io.get_option(cls.OPT_PATH) if io.has_option(cls.OPT_PATH) else None

        settings = container.get(InstanceSettingsProvider).get(DataSettings)

        if action == cls.ACTION_MIGRATE:
            path = path or settings[DataSettings.KEY_MIGRATIONS_LIST_FILE]
            FileMigrationRunner(io, path).migrate(container)
        elif action == cls.ACTION_ROLLBACK:
            path = path or settings[DataSettings.KEY_MIGRATIONS_LIST_FILE]
            FileMigrationRunner(io, path).rollback(container)
        elif action == cls.ACTION_SEED:
            path = path or settings[DataSettings.KEY_SEEDS_LIST_FILE]
            seed_init = settings.get(DataSettings.KEY_SEED_INIT)
            FileSeedRunner(io, path, seed_init).run(container)
        else:
            io.write_error(f"Unsupported action `{action}`.")
            return

        logger.info(f"Database action `{action}` completed")
