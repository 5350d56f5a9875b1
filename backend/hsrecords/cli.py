# Overview: Flask CLI command groups for bootstrap and user inspection.

# backend/hsrecords/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init-db
#   Create all tables that do not exist yet.
# - python -m flask system seed [--admin-password admin] [--user-password user]
#   Idempotent: upsert the admin/user accounts and the default lookup lists.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users list
#   List all users with role.
# - python -m flask users create --username jdoe --password secret --role USER
#   Create a user (prompts if options are omitted).
# - python -m flask users grant jdoe /dashboard/report-incident [--exact]
#   Grant a UI route (prefix match unless --exact).

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import User, UserRole
from .services import lookup_service, user_service
from .services.auth_service import hash_password
from .validation import ConflictError, ValidationError


# (type, [(value, label, order)])
DEFAULT_LOOKUPS = [
    ("site", [
        ("plant-a", "Plant A", 1),
        ("plant-b", "Plant B", 2),
        ("warehouse", "Warehouse", 3),
        ("office", "Office", 4),
    ]),
    ("incidentArea", [
        ("production", "Production", None),
        ("maintenance", "Maintenance", None),
        ("warehouse", "Warehouse", None),
        ("office", "Office", None),
        ("outdoors", "Outdoors", None),
    ]),
    ("incidentCategory", [
        ("near-miss", "Near miss", None),
        ("first-aid", "First aid", None),
        ("medical", "Medical", None),
        ("lost-time", "Lost time", None),
        ("property", "Property damage", None),
    ]),
    ("shift", [
        ("morning", "Morning", None),
        ("afternoon", "Afternoon", None),
        ("night", "Night", None),
    ]),
    ("severity", [
        ("low", "Low", None),
        ("medium", "Medium", None),
        ("high", "High", None),
        ("critical", "Critical", None),
    ]),
    ("personnelType", [
        ("employee", "Employee", None),
        ("contractor", "Contractor", None),
        ("visitor", "Visitor", None),
    ]),
    ("injuryArea", [
        ("head", "Head", None),
        ("hand", "Hand", None),
        ("arm", "Arm", None),
        ("leg", "Leg", None),
        ("back", "Back", None),
        ("other", "Other", None),
    ]),
    ("operationalCategory", [
        ("mechanical", "Mechanical", None),
        ("electrical", "Electrical", None),
        ("chemical", "Chemical", None),
        ("ergonomic", "Ergonomic", None),
        ("safety", "Safety", None),
        ("environmental", "Environmental", None),
    ]),
    ("currency", [
        ("USD", "USD ($)", 1),
        ("EUR", "EUR (€)", 2),
        ("MXN", "MXN ($)", 3),
        ("INR", "INR (₹)", 4),
        ("GBP", "GBP (£)", 5),
    ]),
]


def upsert_seed_user(username: str, password: str, role: str, name: str, email: str) -> User:
    """Create or reset a seed account; the password is always re-hashed."""
    user = db.session.query(User).filter_by(username=username).first()
    if not user:
        user = User(username=username)
        db.session.add(user)
    user.password_hash = hash_password(password)
    user.role = role
    user.name = name
    user.email = email
    db.session.commit()
    return user


def seed_lookups() -> int:
    count = 0
    for lookup_type, items in DEFAULT_LOOKUPS:
        for value, label, order in items:
            lookup_service.upsert_item(lookup_type, value, label, order=order, active=True)
            count += 1
    return count


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create missing tables (use migrations for existing databases)."""
    db.create_all()
    click.echo("PASS Tables created")


@system_group.command('seed')
@click.option('--admin-password', default='admin', show_default=True, help='Password for the admin account')
@click.option('--user-password', default='user', show_default=True, help='Password for the user account')
@with_appcontext
def seed(admin_password, user_password):
    """
    Idempotent seed: admin and user accounts plus default lookup lists.

    SECURITY: Change the default passwords immediately outside development!
    """
    click.echo("START Seeding...")

    upsert_seed_user("admin", admin_password, UserRole.ADMIN, "Admin", "admin@example.local")
    upsert_seed_user("user", user_password, UserRole.USER, "User", "user@example.local")
    click.echo("PASS Users: admin (ADMIN), user (USER)")

    count = seed_lookups()
    click.echo(f"PASS Lookup items upserted: {count}")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()
    click.echo("PASS Database reset")


# =============================================================================
# USER MANAGEMENT COMMANDS
# =============================================================================

@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('create')
@click.option('--username', prompt=True, help='Username')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--role', type=click.Choice(list(UserRole.ALL), case_sensitive=False), default=UserRole.USER, show_default=True)
@click.option('--name', default=None, help='Display name')
@click.option('--email', default=None, help='Email address')
@with_appcontext
def create_user_cli(username, password, role, name, email):
    """Create a new user."""
    try:
        user = user_service.create_user(username, password, role=role, name=name, email=email)
        click.echo(f"PASS Created user: {user.username} (ID: {user.id}, role {user.role})")
    except (ConflictError, ValidationError) as e:
        click.echo(f"FAIL {e}")


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with their role."""
    users = user_service.list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<5} {'Username':<20} {'Role':<8} {'Email':<30} {'Routes'}")
    click.echo("="*80)

    for user in users:
        routes = len(user.route_access) if not user.is_admin else "all"
        click.echo(f"{user.id:<5} {user.username:<20} {user.role:<8} {user.email or '-':<30} {routes}")

    click.echo("="*80 + "\n")


@users_group.command('grant')
@click.argument('username')
@click.argument('path')
@click.option('--exact', is_flag=True, help='Exact path match instead of prefix')
@with_appcontext
def grant_route(username, path, exact):
    """Grant PATH to USERNAME."""
    user = db.session.query(User).filter_by(username=username).first()
    if not user:
        click.echo(f"FAIL User '{username}' not found")
        return
    try:
        grant = user_service.grant_route_access(user.id, path, is_prefix=not exact)
    except ValidationError as e:
        click.echo(f"FAIL {e}")
        return
    kind = "prefix" if grant.is_prefix else "exact"
    click.echo(f"PASS Granted {grant.path} ({kind}) to {user.username}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
