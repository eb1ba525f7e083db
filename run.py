"""Serve the event finder frontend.

ENVIRONMENT=production serves the app through Gunicorn on 0.0.0.0;
anything else runs Flask's reloading dev server on localhost. PORT picks the
port (default 5001) and GUNICORN_WORKERS the worker count.
"""

import os
import sys
from eventfinder.config import IS_PRODUCTION_ENVIRONMENT
from eventfinder.web import create_app

app = create_app()

def serve_with_gunicorn(port: int) -> None:
    from gunicorn.app.base import BaseApplication

    class FrontendServer(BaseApplication):
        def __init__(self, application, options):
            self.options = options
            self.application = application
            super().__init__()

        def load_config(self):
            for key, value in self.options.items():
                self.cfg.set(key.lower(), value)

        def load(self):
            return self.application

    FrontendServer(app, {
        'bind': f'0.0.0.0:{port}',
        'workers': os.environ.get('GUNICORN_WORKERS', '2'),
        # Each request waits on the events API
        'timeout': app.config['API_TIMEOUT'] + 30,
    }).run()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5001))

    if not IS_PRODUCTION_ENVIRONMENT:
        app.run(host='localhost', port=port, debug=True)
    else:
        try:
            serve_with_gunicorn(port)
        except ImportError:
            sys.exit("Gunicorn is required in production: pip install gunicorn")
