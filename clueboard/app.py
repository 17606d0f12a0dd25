import atexit
from typing import Any, Optional

from flask import Flask, abort, jsonify, request

from .board import GameBoard
from .config import Settings, configure_logging, load_settings
from .errors import InvalidCell, NoActiveLevel, UnknownClue, UnknownLevel
from .levels import level_choices
from .navigation import RecordingFocusController
from .runner import LoopRunner
from .storage import KeyValueStore


def create_app(settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> Flask:
    """
    JSON adapter over a GameBoard. The page owns the actual inputs; every response
    tells it which cell should take focus next and which should drop it.
    """
    settings = settings or load_settings()
    app = Flask(__name__)

    runner = LoopRunner()
    atexit.register(runner.stop)
    focus = RecordingFocusController()
    board = GameBoard.from_settings(settings, store=store, focus_controller=focus)
    app.extensions['clueboard'] = {'board': board, 'runner': runner, 'focus': focus}

    def body_field(name: str) -> Any:
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            abort(400, description="request body must be a JSON object")
        return payload.get(name)

    def with_focus(payload: dict[str, Any]) -> dict[str, Any]:
        payload['focus'] = focus.focused.key if focus.focused else None
        payload['blur'] = focus.blurred.key if focus.blurred else None
        payload['state'] = board.snapshot()
        focus.reset()
        return payload

    @app.errorhandler(InvalidCell)
    def invalid_cell(e: InvalidCell):
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(UnknownClue)
    @app.errorhandler(UnknownLevel)
    def not_found(e):
        return jsonify({'error': str(e)}), 404

    @app.errorhandler(NoActiveLevel)
    def no_level(e: NoActiveLevel):
        return jsonify({'error': str(e)}), 409

    @app.route('/api/levels', methods=['GET'])
    def list_levels():
        return jsonify([{'id': level_id, 'title': title} for level_id, title in level_choices(board.catalog)])

    @app.route('/api/levels/<level_id>/select', methods=['POST'])
    def select_level(level_id: str):
        runner.run(board.select_level(level_id))
        focus.reset()
        return jsonify(runner.call(board.snapshot))

    @app.route('/api/state', methods=['GET'])
    def get_state():
        return jsonify(runner.call(board.snapshot))

    @app.route('/api/submit', methods=['POST'])
    def submit_letter():
        position, char = body_field('position'), body_field('char')

        def handle():
            result = board.submit_letter(position, char)
            return with_focus({'accepted': result.accepted, 'became_correct': result.became_correct})

        return jsonify(runner.call(handle))

    @app.route('/api/clear', methods=['POST'])
    def clear_letter():
        position = body_field('position')
        return jsonify(runner.call(lambda: with_focus({'accepted': board.clear_letter(position)})))

    @app.route('/api/key', methods=['POST'])
    def key_pressed():
        position, key = body_field('position'), body_field('key')
        return jsonify(runner.call(lambda: with_focus({'handled': board.key_pressed(position, key)})))

    @app.route('/api/focus', methods=['POST'])
    def focus_requested():
        position = body_field('position')
        return jsonify(runner.call(lambda: with_focus({'outcome': board.focus_requested(position).value})))

    @app.route('/api/clues/<clue_id>', methods=['POST'])
    def activate_clue(clue_id: str):
        path = runner.call(board.activate_clue, clue_id)
        return jsonify({'clue_id': clue_id, 'asset_path': path})

    @app.route('/api/reset', methods=['POST'])
    def reset_level():
        runner.run(board.reset_level())
        return jsonify(runner.call(board.snapshot))

    return app


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    create_app(settings).run(debug=False)


if __name__ == '__main__':
    main()
