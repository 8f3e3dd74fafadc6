import eventlet
eventlet.monkey_patch()

import os

from halalgains import create_app
from halalgains.extensions import socketio

app = create_app(os.getenv('FLASK_CONFIG', 'development'))

if __name__ == '__main__':
    socketio.run(app, debug=app.config.get('DEBUG', False), port=int(os.getenv('PORT', 5000)))
