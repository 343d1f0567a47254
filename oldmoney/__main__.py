#setup: pip install -e ".[test]"
#setup: flask --app oldmoney.app run --port 5000 --debug   (or: python -m oldmoney)

from oldmoney.app import create_app

if __name__ == "__main__":
    create_app().run(port=5000, debug=True)
