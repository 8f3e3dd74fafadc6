import click

from halalgains.services.accounts import create_coach


def register_commands(app):
    @app.cli.command("create-coach")
    @click.argument("email")
    @click.argument("password")
    @click.argument("full_name")
    def create_coach_command(email, password, full_name):
        """Create a coach account with an empty coach profile."""
        profile = create_coach(email, password, full_name)
        if profile is None:
            click.echo(f"User with email {email} already exists.")
            return
        click.echo(f"Coach {profile.full_name} created (user id {profile.user_id}, coach id {profile.id}).")
