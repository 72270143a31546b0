from main import _parse_args


def test_default_command_invokes_serve() -> None:
    args = _parse_args([])
    assert args.command == "serve"


def test_default_command_accepts_options_without_subcommand() -> None:
    args = _parse_args(["--host", "127.0.0.1", "--port", "8080"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 8080


def test_create_user_subcommand_takes_name_and_email() -> None:
    args = _parse_args(["create-user", "Ada", "ada@example.com"])
    assert args.command == "create-user"
    assert args.name == "Ada"
    assert args.email == "ada@example.com"


def test_maintenance_subcommands_available() -> None:
    assert _parse_args(["init-db"]).command == "init-db"
    assert _parse_args(["list-users"]).command == "list-users"


def test_create_user_command_stores_hashed_password(tmp_path, monkeypatch, capsys) -> None:
    import main
    from userapi.database import Database

    db_path = tmp_path / "cli.sqlite3"
    monkeypatch.setenv("USERAPI_DB_PATH", str(db_path))
    monkeypatch.setenv("USERAPI_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setattr(main, "getpass", lambda prompt="": "cli-password")

    assert main.main(["create-user", "Ada", "ada@example.com"]) == 0
    assert "Created user #1: Ada <ada@example.com>" in capsys.readouterr().out

    rows = Database(db_path).all("SELECT name, email, password FROM users")
    assert rows[0]["name"] == "Ada"
    assert rows[0]["password"] != "cli-password"

    assert main.main(["list-users"]) == 0
    assert "ada@example.com" in capsys.readouterr().out


def test_create_user_command_gives_up_after_mismatched_passwords(tmp_path, monkeypatch) -> None:
    import main

    answers = iter(["first", "second"] * 3)
    monkeypatch.setenv("USERAPI_DB_PATH", str(tmp_path / "cli.sqlite3"))
    monkeypatch.setenv("USERAPI_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setattr(main, "getpass", lambda prompt="": next(answers))

    assert main.main(["create-user", "Ada", "ada@example.com"]) == 1
