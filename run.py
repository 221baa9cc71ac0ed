"""
Service request automation — application entry point.

Usage:
    python run.py
"""
from service_automation import create_app
from service_automation.config import PORT

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=PORT, debug=False)
