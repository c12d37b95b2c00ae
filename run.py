from parlay_club import create_app, socketio
from parlay_club.models import Game, Pick
from parlay_club.utils import scoring

app = create_app()


@app.shell_context_processor
def make_shell_context():
    pool = app.extensions["parlay_club"]
    return {
        "Game": Game,
        "Pick": Pick,
        "scoring": scoring,
        "clock": pool.clock,
        "engine": pool.engine,
    }


if __name__ == "__main__":
    socketio.run(app, host="0.0.0.0", port=5000, debug=app.debug, allow_unsafe_werkzeug=True)
