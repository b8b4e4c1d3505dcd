import click
from flask.cli import with_appcontext

from bulk_user_admin.extensions import db, fake
from bulk_user_admin.models.Role import Role
from bulk_user_admin.models.Section import Section
from bulk_user_admin.models.User import User
from bulk_user_admin.models.enumerations import DEFAULT_ROLES, DEFAULT_SECTIONS


@click.command("seed-directory")
@with_appcontext
def seed_directory():
    """Create the default sections and roles (idempotent)."""
    created = 0
    for order, (alias, name) in enumerate(DEFAULT_SECTIONS):
        if db.session.get(Section, alias) is None:
            db.session.add(Section(alias=alias, name=name, sort_order=order))
            created += 1
    for alias, name in DEFAULT_ROLES:
        if Role.query.filter_by(alias=alias).first() is None:
            db.session.add(Role(alias=alias, name=name))
            created += 1
    db.session.commit()
    click.secho(f"✅ Directory seeded ({created} new rows)", fg='green')


@click.command("create-user")
@click.option("--name", prompt="Display name", help="Display name of the new user")
@click.option("--email", prompt="Email address", help="Email address")
@click.option("--username", default=None, help="Login name (defaults to the email address)")
@click.option("--role", "role_alias", default="administrators", show_default=True, help="Role alias")
@click.option(
    "--section",
    "sections",
    multiple=True,
    help="Allowed section alias (repeatable, e.g. --section content --section users)"
)
@with_appcontext
def create_user(name, email, username, role_alias, sections):
    """Create a new user from the CLI."""
    username = username or email
    existing_user = User.query.filter(
        (User.username == username) | (User.email == email)
    ).first()
    if existing_user:
        click.secho(
            "❌ A user with the same username or email already exists.", fg='red')
        return

    role = Role.query.filter_by(alias=role_alias).first()
    if role is None:
        raise click.ClickException(f"Unknown role '{role_alias}'. Run 'flask seed-directory' first?")
    unknown = [s for s in sections if db.session.get(Section, s) is None]
    if unknown:
        raise click.ClickException(f"Unknown section(s): {', '.join(unknown)}")

    user = User(name=name, email=email, username=username, role=role,
                is_approved=True, is_locked_out=False)
    for alias in sections:
        user.add_allowed_section(alias)
    db.session.add(user)
    db.session.commit()
    click.secho(
        f"✅ User '{name}' created (id={user.id}, role={role.name}, sections={list(sections) or '[]'})", fg='green')


@click.command("seed-demo-users")
@click.option("--count", default=25, show_default=True, type=click.IntRange(min=1), help="Number of users to generate")
@with_appcontext
def seed_demo_users(count):
    """Generate fake users spread across the existing roles."""
    roles = Role.query.order_by(Role.id).all()
    if not roles:
        raise click.ClickException("No roles found. Run 'flask seed-directory' first.")
    section_aliases = [s.alias for s in Section.query.all()]
    for i in range(count):
        email = fake.unique.email()
        user = User(
            name=fake.name(),
            email=email,
            username=email,
            role=roles[i % len(roles)],
            is_approved=fake.boolean(chance_of_getting_true=85),
            is_locked_out=fake.boolean(chance_of_getting_true=10),
        )
        if section_aliases:
            picks = fake.random_elements(elements=section_aliases, unique=True,
                                         length=fake.random_int(min=1, max=len(section_aliases)))
            for alias in picks:
                user.add_allowed_section(alias)
        db.session.add(user)
    db.session.commit()
    click.secho(f"✅ {count} demo users created", fg='green')
