"""
Flask CLI commands for database and catalog management.

Commands:
- flask init-db: Create the database tables
- flask create-product: Register a product in the catalog
"""

import click
from kiosk.database import create_schema, drop_schema, get_session
from kiosk.exceptions import KioskError, ValidationError
from kiosk.schemas import ProductCreate
from kiosk.services import product_service
from kiosk.utils.validation import parse_body


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables first')
    def init_db_command(drop):
        """Create every table (product, sale, product_sale)."""
        if drop:
            drop_schema()
            click.echo(click.style('Tablas eliminadas.', fg='yellow'))
        create_schema()
        click.echo(click.style('Tablas sincronizadas exitosamente.', fg='green'))

    @app.cli.command('create-product')
    @click.option('--barcode', prompt=True, help='Unique product barcode')
    @click.option('--name', prompt=True, help='Product name')
    @click.option('--stock', type=click.IntRange(min=0), default=0, show_default=True)
    @click.option('--cost-price', type=click.IntRange(min=0), default=0, show_default=True)
    @click.option('--sale-price', type=click.IntRange(min=0), default=0, show_default=True)
    def create_product_command(barcode, name, stock, cost_price, sale_price):
        """Register a product in the catalog."""
        fields = {
            'barcode': barcode,
            'name': name,
            'stock': stock,
            'cost_price': cost_price,
            'sale_price': sale_price,
        }
        try:
            data = parse_body(ProductCreate, fields, 'Datos de producto inválidos.')
            product = product_service.save_product(get_session(), data)
        except ValidationError as e:
            raise click.ClickException(f"{e.message} {'; '.join(e.cause)}")
        except KioskError as e:
            raise click.ClickException(e.message)

        click.echo(click.style('Producto creado exitosamente!', fg='green', bold=True))
        click.echo(f'   ID: {product.id}')
        click.echo(f'   Código: {product.barcode}')
