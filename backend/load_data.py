"""
Data Loader Script - seeds tests and questions from a JSON file.

Test authoring is not exposed over the API, so local environments are
populated directly through the ORM. Each entry in the file looks like:

    {
        "title": "Physics Mock 1",
        "duration_minutes": 30,
        "total_marks": 8,
        "is_published": true,
        "creator_email": "physics.lead@school.edu",
        "questions": [
            {"question_type": "mcq", "options": ["A", "B", "C", "D"],
             "correct_answer": "B", "marks": 4, "negative_marks": 1}
        ]
    }

Usage:
    python load_data.py                      # Loads sample_tests.json
    python load_data.py path/to/tests.json   # Custom file
"""

import json
import os
import sys

from testdesk.database import SessionLocal, create_tables
from testdesk.models import Question, Test, User


def load_tests(db, entries: list) -> list:
    """Insert the given test entries and return the created Test rows."""
    created = []
    for entry in entries:
        creator_id = None
        creator_email = entry.get("creator_email")
        if creator_email:
            creator = db.query(User).filter(User.email == creator_email.strip().lower()).first()
            if creator:
                creator_id = creator.id
            else:
                print(f"  ! creator {creator_email} not registered, leaving test unowned")

        test = Test(
            title=entry["title"],
            duration_minutes=entry.get("duration_minutes", 60),
            total_marks=entry.get("total_marks", 0),
            is_published=entry.get("is_published", False),
            created_by=creator_id,
        )
        test.questions = [
            Question(
                question_type=q.get("question_type", "mcq"),
                image_url=q.get("image_url"),
                options=q.get("options", []),
                correct_answer=q["correct_answer"],
                marks=q.get("marks", 1),
                negative_marks=q.get("negative_marks", 0),
            )
            for q in entry.get("questions", [])
        ]
        db.add(test)
        created.append(test)

    db.commit()
    return created


def main():
    data_file = sys.argv[1] if len(sys.argv) > 1 else os.path.join(
        os.path.dirname(os.path.abspath(__file__)), "sample_tests.json"
    )
    if not os.path.exists(data_file):
        print(f"Error: Could not find {data_file}")
        sys.exit(1)

    print(f"Loading tests from: {data_file}")
    with open(data_file, "r") as f:
        entries = json.load(f)

    create_tables()
    db = SessionLocal()
    try:
        tests = load_tests(db, entries)
        print("=" * 60)
        print("LOAD SUMMARY")
        print("=" * 60)
        for test in tests:
            state = "published" if test.is_published else "draft"
            print(f"  {test.id}: {test.title} ({len(test.questions)} questions, {state})")
        print("=" * 60)
    finally:
        db.close()


if __name__ == "__main__":
    main()
