"""
Unit tests for the project registry and the homepage.
"""
import unittest

from flask import Flask

from app.projects.registry import (
    get_active_projects,
    get_homepage_items,
    get_project_by_id,
)
from app.routes.main import main_bp


class TestRegistry(unittest.TestCase):

    def test_calculator_is_registered(self):
        project = get_project_by_id("calculator")
        self.assertIsNotNone(project)
        self.assertEqual(project["url"], "/calculator")
        self.assertIn(project, get_active_projects())

    def test_unknown_project(self):
        self.assertIsNone(get_project_by_id("nope"))

    def test_homepage_items_are_copies_with_availability(self):
        items = get_homepage_items()
        calculator = next(i for i in items if i["id"] == "calculator")
        self.assertTrue(calculator["available"])
        self.assertNotIn("available", get_project_by_id("calculator"))


class TestMainRoutes(unittest.TestCase):

    def setUp(self):
        app = Flask("app")
        app.config["TESTING"] = True
        app.register_blueprint(main_bp)
        self.client = app.test_client()

    def test_homepage_lists_calculator(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)
        self.assertIn("Calculator", r.get_data(as_text=True))

    def test_unknown_page_returns_404(self):
        r = self.client.get("/does-not-exist")
        self.assertEqual(r.status_code, 404)
        self.assertIn("Page not found", r.get_data(as_text=True))


if __name__ == "__main__":
    unittest.main()
