# dev_hotreload.py — dev server that restarts on source changes
from livereload import Server
from app import app  # module-level create_app() in app.py

server = Server(app.wsgi_app)
server.watch('*.py')
server.watch('api/*.py')
server.watch('services/*.py')
server.watch('.env')

# port 5001, debug on
server.serve(host='127.0.0.1', port=5001, debug=True)
