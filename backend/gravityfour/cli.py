import click
from flask import current_app
from flask.cli import with_appcontext

from gravityfour.models import Action, Session
from gravityfour.services.games import rules
from gravityfour.services.games.board import render_board
from gravityfour.services.games.errors import GameError


def _parse_token(token: str):
    """``3`` places in column 3; ``5,0`` removes the piece at row 5, col 0."""
    try:
        if ',' in token:
            row, col = token.split(',', 1)
            return Action.REMOVE, (int(row), int(col))
        return Action.PLACE, (int(token),)
    except ValueError:
        raise click.BadParameter(f'cannot read move {token!r}')


@click.command('replay-moves')
@click.argument('moves', nargs=-1)
@click.option('--keep-going', is_flag=True, help='Skip rejected moves instead of stopping.')
@with_appcontext
def replay_moves_command(moves, keep_going):
    """Replays a move list through the game rules and prints the board."""
    cfg = current_app.config
    remove_every = int(cfg.get('REMOVE_EVERY_N_TURNS', rules.DEFAULT_REMOVE_EVERY))
    if remove_every < 2:
        raise click.ClickException(f'REMOVE_EVERY_N_TURNS must be at least 2, got {remove_every}')
    session = Session.start('REPLAY', 'P1', 'P2', int(cfg.get('BOARD_ROWS', 6)), int(cfg.get('BOARD_COLS', 7)))

    for token in moves:
        kind, args = _parse_token(token)
        actor = session.current_player_id
        try:
            if kind == Action.PLACE:
                rules.place_piece(session, actor, *args, remove_every=remove_every)
            else:
                rules.remove_piece(session, actor, *args)
        except GameError as err:
            click.echo(f'{actor} {token}: rejected ({err.kind}: {err.message})')
            if not keep_going:
                click.echo(render_board(session.board))
                click.get_current_context().exit(1)

    click.echo(render_board(session.board))
    if session.winner:
        click.echo(f'winner: {session.winner}')
    elif session.draw:
        click.echo('draw')
    else:
        click.echo(f'turn {session.turn}: {session.current_player_id} to {session.action}')
