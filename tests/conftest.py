pytest_plugins = ["retype.test_utils.fixtures"]
