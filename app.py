from src.chronosforce.chronosforce.main import create_app

app = create_app()


if __name__ == "__main__":
    # The shift-boundary scheduler runs in-process; the reloader would start it twice.
    app.run(debug=app.config["DEBUG"], use_reloader=False)
