# backend/wsgi.py
from hsrecords import create_app

app = create_app()
