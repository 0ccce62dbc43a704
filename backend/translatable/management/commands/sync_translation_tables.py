import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from translatable.registry import registry
from translatable.schema import sync_translation_table

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create missing translation tables and add newly translated columns'

    def add_arguments(self, parser):
        parser.add_argument(
            'labels',
            nargs='*',
            help='Restrict to app labels or app_label.ModelName',
        )
        parser.add_argument(
            '--database',
            default=DEFAULT_DB_ALIAS,
            help='Database to synchronize',
        )
        parser.add_argument(
            '--quiet',
            action='store_true',
            help='Run quietly without detailed output',
        )

    def handle(self, *args, **options):
        labels = options.get('labels') or []
        quiet = options.get('quiet', False)
        bindings = self.select_bindings(labels)

        if not bindings:
            if not quiet:
                self.stdout.write(self.style.WARNING('No translatable models found'))
            return

        changed = 0
        for binding in bindings:
            result = sync_translation_table(binding.parent_model, using=options['database'])
            if result.changed:
                changed += 1
            if quiet:
                continue
            if result.created:
                self.stdout.write(self.style.SUCCESS(f'Created {result.table}'))
            elif result.added_columns:
                self.stdout.write(self.style.SUCCESS(
                    f"Added {', '.join(result.added_columns)} to {result.table}"
                ))
            else:
                self.stdout.write(f'{result.table} is up to date')

        logger.info(f'Translation tables synchronized: {changed} of {len(bindings)} changed')

    def select_bindings(self, labels):
        bindings = registry.bindings()
        if not labels:
            return bindings

        selected = []
        for label in labels:
            matches = [
                binding for binding in bindings
                if label.lower() in (
                    binding.parent_model._meta.app_label.lower(),
                    binding.parent_model._meta.label_lower,
                )
            ]
            if not matches:
                raise CommandError(f'No translatable model matches "{label}"')
            selected.extend(match for match in matches if match not in selected)
        return selected
