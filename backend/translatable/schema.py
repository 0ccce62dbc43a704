import logging
from dataclasses import dataclass, field
from typing import List

from django.db import connections, router

logger = logging.getLogger(__name__)


@dataclass
class TableSync:
    table: str
    created: bool = False
    added_columns: List[str] = field(default_factory=list)

    @property
    def changed(self):
        return self.created or bool(self.added_columns)


def sync_translation_table(parent, using=None):
    """
    Create the translation table of ``parent`` or add its missing columns.

    Columns are only ever added; dropping or renaming one is left to a
    migration written by hand. Running it again without new translated
    fields changes nothing.

    :param parent: Translatable model with declared translations
    :param using: Database alias, defaults to the router's choice
    :return: TableSync describing what was changed
    """
    binding = parent.get_translation_binding()
    model = binding.translation_model
    table = model._meta.db_table
    using = using or router.db_for_write(model)
    connection = connections[using]
    result = TableSync(table=table)

    with connection.cursor() as cursor:
        existing_tables = connection.introspection.table_names(cursor)
        columns = set()
        if table in existing_tables:
            columns = {
                column.name
                for column in connection.introspection.get_table_description(cursor, table)
            }

    if table not in existing_tables:
        with connection.schema_editor() as schema_editor:
            schema_editor.create_model(model)
        result.created = True
        logger.info(f"Created translation table {table}")
        return result

    missing = [
        model._meta.get_field(name)
        for name in binding.fields
        if model._meta.get_field(name).column not in columns
    ]
    if missing:
        with connection.schema_editor() as schema_editor:
            for translated_field in missing:
                schema_editor.add_field(model, translated_field)
                result.added_columns.append(translated_field.column)
        logger.info(f"Added columns {', '.join(result.added_columns)} to {table}")
    return result
