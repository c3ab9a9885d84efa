# FILE: seed.py
from flask import current_app

from models import Category, Question, db


# category -> [(difficulty, question, sample answer)]
STARTER_QUESTIONS = {
    "Python": [
        (
            "Easy",
            "Explain the difference between a list and a tuple in Python and when to use each.",
            "A list is mutable and suited for collections that change. A tuple is immutable, "
            "hashable when its items are, and fits fixed records and dictionary keys.",
        ),
        (
            "Medium",
            "What is the GIL and how does it affect multithreaded Python programs?",
            "The Global Interpreter Lock lets only one thread execute Python bytecode at a time, so CPU-bound "
            "threads do not run in parallel. I/O-bound work still benefits from threads; CPU-bound work uses "
            "multiprocessing or native extensions that release the GIL.",
        ),
        (
            "Hard",
            "How would you find and fix a memory leak in a long-running Python service?",
            "Measure first with tracemalloc snapshots or objgraph, compare allocations over time, look for "
            "growing caches, reference cycles with __del__, and global registries. Fix by bounding caches, "
            "using weak references and releasing resources deterministically.",
        ),
    ],
    "Databases": [
        (
            "Easy",
            "What is the difference between an INNER JOIN and a LEFT JOIN?",
            "An inner join returns only rows with matches on both sides. A left join returns every row of the "
            "left table and fills columns of the right table with NULL where no match exists.",
        ),
        (
            "Medium",
            "When would you add an index to a table, and what does it cost?",
            "Index columns used in selective filters, joins and ordering. Indexes speed up reads but take space "
            "and slow down inserts and updates, so they should follow real query patterns.",
        ),
        (
            "Hard",
            "Explain transaction isolation levels and the anomalies each one prevents.",
            "Read uncommitted allows dirty reads; read committed prevents them; repeatable read also prevents "
            "non-repeatable reads; serializable also prevents phantoms and write skew, at a concurrency cost.",
        ),
    ],
    "System Design": [
        (
            "Medium",
            "How would you design a URL shortener?",
            "Generate short keys (counter with base62 or hashing), store key to URL in a key-value store, "
            "cache hot keys, redirect with 301/302, and plan for analytics, expiry and abuse protection.",
        ),
        (
            "Hard",
            "How would you design a rate limiter for a public API?",
            "Choose an algorithm (token bucket, sliding window), keep counters in a shared store such as Redis "
            "with atomic operations, key by client, return 429 with retry headers and handle clock skew.",
        ),
    ],
    "Behavioral": [
        (
            "Easy",
            "Tell me about a time you had to adapt quickly to a major change.",
            "Use STAR: describe the change, the plan, the actions taken and a measurable outcome.",
        ),
        (
            "Medium",
            "How do you handle conflict with a coworker in a professional setting?",
            "Address it privately, listen first, align on shared goals, agree on next steps and follow up.",
        ),
    ],
}


def seed_question_bank() -> int:
    """
    Insert the starter categories and questions.
    Categories that already have questions are skipped, so running it twice is safe.
    """
    inserted = 0
    for category_name, items in STARTER_QUESTIONS.items():
        category = Category.query.filter_by(name=category_name).first()
        if category is None:
            category = Category(name=category_name, is_active=True)
            db.session.add(category)
        elif Question.query.filter(Question.categories.any(Category.id == category.id)).count() > 0:
            current_app.logger.warning("'%s' already has questions. Skipping.", category_name)
            continue

        for difficulty, content, sample_answer in items:
            question = Question(
                content=content,
                sample_answer=sample_answer,
                difficulty_level=difficulty,
                is_active=True,
            )
            question.categories.append(category)
            db.session.add(question)
            inserted += 1

    db.session.commit()
    current_app.logger.info("Seeded %d question(s).", inserted)
    return inserted
