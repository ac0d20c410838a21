from notes_api import create_app
from notes_api.extensions import db

app = create_app()

if __name__ == "__main__":
    # pas de migrations livrées: on crée les tables manquantes au démarrage
    with app.app_context():
        db.create_all()
    app.logger.info("server_starting", extra={"port": app.config["PORT"]})
    app.run(host="0.0.0.0", port=app.config["PORT"])
