from flask import Blueprint, current_app, jsonify

sessions = Blueprint('sessions', __name__)


@sessions.route('', methods=['GET'])
def list_sessions():
    """Returns a summary of every live session."""
    return jsonify(current_app.extensions['gravityfour'].sessions()), 200


@sessions.route('/<string:room_id>/state', methods=['GET'])
def get_session_state(room_id):
    """Returns the full snapshot of one session, as sent to its players."""
    snapshot = current_app.extensions['gravityfour'].snapshot(room_id.upper())
    if snapshot is None:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify(snapshot), 200
