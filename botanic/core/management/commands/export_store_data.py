"""
Management command to export store data (products, orders, inventory) to JSON
"""
from pathlib import Path

from django.core.management.base import BaseCommand

from botanic.core.exports import dump_export, export_filename, export_store_data


class Command(BaseCommand):
    help = "Exports products, orders and inventory items to a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            '--output-dir',
            default='.',
            help='Directory where the export file is written (default: current directory)',
        )
        parser.add_argument(
            '--stdout',
            action='store_true',
            help='Print the export instead of writing a file',
        )

    def handle(self, *args, **options):
        data = export_store_data()
        content = dump_export(data)

        if options['stdout']:
            self.stdout.write(content)
            return

        output_dir = Path(options['output_dir'])
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / export_filename()
        path.write_text(content, encoding='utf-8')

        counts = ', '.join(f"{name}: {len(rows)}" for name, rows in data.items())
        self.stdout.write(self.style.SUCCESS(f"Exported to {path} ({counts})"))
