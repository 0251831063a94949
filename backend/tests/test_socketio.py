NS = '/ws'


def _names(received):
    return [pkt['name'] for pkt in received]


def _last(received, name):
    return [pkt for pkt in received if pkt['name'] == name][-1]['args'][0]


def _pair(connect_client):
    first = connect_client()
    second = connect_client()
    assign_a = _last(first.get_received(NS), 'assignPlayer')
    assign_b = _last(second.get_received(NS), 'assignPlayer')
    return first, second, assign_a, assign_b


def test_socket_connect_waits(sio_client):
    assert sio_client.is_connected(NS)
    received = sio_client.get_received(NS)
    assert _names(received) == ['waiting']


def test_second_socket_pairs_both(connect_client):
    first, second, assign_a, assign_b = _pair(connect_client)
    assert assign_a['playerNumber'] == 1
    assert assign_b['playerNumber'] == 2
    state = assign_a['state']
    assert state == assign_b['state']
    assert state['action'] == 'PLACE'
    assert state['turn'] == 1
    assert state['currentPlayerId'] == state['playerIds'][0]
    assert state['players'][state['playerIds'][0]]['color'] == 'red'


def test_place_piece_updates_both(connect_client):
    first, second, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    first.emit('placePiece', {'roomId': room, 'col': 3}, namespace=NS)
    for client in (first, second):
        update = _last(client.get_received(NS), 'gameStateUpdate')
        assert update['board'][5][3] == 'red'
        assert update['turn'] == 2
        assert update['currentPlayerId'] == assign_a['state']['playerIds'][1]


def test_out_of_turn_move_only_answers_actor(connect_client):
    first, second, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    second.emit('placePiece', {'roomId': room, 'col': 3}, namespace=NS)
    invalid = _last(second.get_received(NS), 'invalidMove')
    assert invalid['message'] == 'Not your turn.'
    assert first.get_received(NS) == []


def test_malformed_payload_is_rejected(connect_client):
    first, _, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    first.emit('placePiece', {'roomId': room, 'col': 'left'}, namespace=NS)
    invalid = _last(first.get_received(NS), 'invalidMove')
    assert invalid['attemptedCol'] == 'left'
    first.emit('placePiece', 'garbage', namespace=NS)
    error = _last(first.get_received(NS), 'error')
    assert error == {'message': 'Game not found.'}


def test_remove_flow_over_socket(connect_client):
    first, second, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    first.emit('placePiece', {'roomId': room, 'col': 3}, namespace=NS)
    second.emit('placePiece', {'roomId': room, 'col': 0}, namespace=NS)
    first.emit('placePiece', {'roomId': room, 'col': 3}, namespace=NS)
    state = _last(second.get_received(NS), 'gameStateUpdate')
    assert state['action'] == 'REMOVE'
    first.get_received(NS)

    first.emit('removePiece', {'roomId': room, 'row': 5, 'col': 3}, namespace=NS)
    invalid = _last(first.get_received(NS), 'invalidMove')
    assert invalid['message'] == 'Cannot remove your own piece.'

    first.emit('removePiece', {'roomId': room, 'row': 5, 'col': 0}, namespace=NS)
    state = _last(second.get_received(NS), 'gameStateUpdate')
    assert state['board'][5][0] is None
    assert state['action'] == 'PLACE'
    assert state['turn'] == 4


def test_rematch_before_game_over(connect_client):
    first, _, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    first.emit('requestRematch', {'roomId': room}, namespace=NS)
    assert _last(first.get_received(NS), 'error') == {'message': 'Game is still in progress.'}


def test_rematch_after_game_over(flask_app, connect_client):
    first, second, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    flask_app.extensions['gravityfour'].store.get(room).draw = True

    first.emit('requestRematch', {'roomId': room}, namespace=NS)
    assert 'rematchPending' in _names(first.get_received(NS))
    assert 'opponentWantsRematch' in _names(second.get_received(NS))

    second.emit('requestRematch', {'roomId': room}, namespace=NS)
    for client in (first, second):
        state = _last(client.get_received(NS), 'gameStateUpdate')
        assert state['turn'] == 1
        assert state['draw'] is False
        assert state['currentPlayerId'] == assign_a['state']['playerIds'][1]


def test_disconnect_notifies_opponent_once(flask_app, connect_client):
    first, second, assign_a, _ = _pair(connect_client)
    room = assign_a['state']['roomId']
    first.disconnect(namespace=NS)
    received = second.get_received(NS)
    assert _names(received).count('opponentDisconnect') == 1
    service = flask_app.extensions['gravityfour']
    assert service.snapshot(room) is None
    for pid in assign_a['state']['playerIds']:
        assert service.store.find_by_participant(pid) is None


def test_lobby_disconnect_frees_slot(flask_app, sio_client):
    service = flask_app.extensions['gravityfour']
    assert service.is_waiting()
    sio_client.disconnect(namespace=NS)
    assert not service.is_waiting()
