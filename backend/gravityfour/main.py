from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Gravity Four game server!'})

@main.route('/health')
def health():
    service = current_app.extensions['gravityfour']
    return jsonify({
        'status': 'ok',
        'sessions': len(service.sessions()),
        'waiting': service.is_waiting(),
    })
