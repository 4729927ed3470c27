pytest_plugins = ["orgrepos.testing.conftest"]
