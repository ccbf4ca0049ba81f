"""Seed demo accounts, published quizzes and knowledge base entries.

    python -m neuralearn.seed

Safe to run repeatedly: users are matched by email, quizzes by title and
knowledge base entries by subtopic.
"""
import logging
from sqlalchemy import select
from sqlalchemy.orm import Session
from neuralearn.core.auth import hash_password
from neuralearn.core.database import SessionLocal, init_db
from neuralearn.models.orm import Difficulty, KnowledgeBase, Question, Quiz, Role, User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

USERS = [
    {"email": "admin@demo.com", "name": "Admin User", "role": Role.ADMIN},
    {"email": "instructor@demo.com", "name": "Dr. Sarah Johnson", "role": Role.INSTRUCTOR},
    {"email": "student@demo.com", "name": "John Doe", "role": Role.STUDENT},
]

QUIZZES = [
    {
        "title": "Data Structures Fundamentals",
        "description": "Test your knowledge of basic data structures including arrays, linked lists, stacks, and queues.",
        "topic": "Data Structures",
        "difficulty": Difficulty.MEDIUM,
        "duration": 30,
        "questions": [
            {
                "question": "What is the time complexity of accessing an element in an array by index?",
                "options": ["O(1)", "O(n)", "O(log n)", "O(n²)"],
                "correct_answer": 0,
                "explanation": "Array access by index is constant time O(1) because arrays store elements in contiguous memory locations.",
                "topic": "Arrays",
                "difficulty": Difficulty.EASY,
            },
            {
                "question": "Which data structure uses LIFO (Last In First Out) principle?",
                "options": ["Queue", "Stack", "Linked List", "Tree"],
                "correct_answer": 1,
                "explanation": "Stack follows LIFO principle where the last element added is the first one to be removed.",
                "topic": "Stack",
                "difficulty": Difficulty.EASY,
            },
            {
                "question": "What is the worst-case time complexity of inserting an element at the beginning of a singly linked list?",
                "options": ["O(1)", "O(n)", "O(log n)", "O(n log n)"],
                "correct_answer": 0,
                "explanation": "Inserting at the beginning of a linked list takes constant time O(1) as we only need to adjust the head pointer.",
                "topic": "Linked Lists",
                "difficulty": Difficulty.MEDIUM,
            },
            {
                "question": "In a circular queue with size 5, if front = 2 and rear = 4, how many elements are in the queue?",
                "options": ["2", "3", "4", "5"],
                "correct_answer": 1,
                "explanation": "The number of elements is calculated as (rear - front + 1) = (4 - 2 + 1) = 3 elements.",
                "topic": "Queue",
                "difficulty": Difficulty.MEDIUM,
            },
            {
                "question": "Which operation is NOT typically supported by a stack?",
                "options": ["Push", "Pop", "Peek", "Random Access"],
                "correct_answer": 3,
                "explanation": "Stacks do not support random access. You can only access the top element.",
                "topic": "Stack",
                "difficulty": Difficulty.EASY,
            },
        ],
    },
    {
        "title": "Algorithm Analysis and Complexity",
        "description": "Evaluate your understanding of algorithm complexity, Big O notation, and common algorithms.",
        "topic": "Algorithms",
        "difficulty": Difficulty.HARD,
        "duration": 45,
        "questions": [
            {
                "question": "What is the time complexity of Binary Search?",
                "options": ["O(1)", "O(log n)", "O(n)", "O(n log n)"],
                "correct_answer": 1,
                "explanation": "Binary Search divides the search space in half at each step, resulting in O(log n) complexity.",
                "topic": "Searching",
                "difficulty": Difficulty.MEDIUM,
            },
            {
                "question": "Which sorting algorithm has the best average-case time complexity?",
                "options": ["Bubble Sort", "Insertion Sort", "Merge Sort", "Selection Sort"],
                "correct_answer": 2,
                "explanation": "Merge Sort has O(n log n) average-case complexity, which is better than O(n²) for bubble, insertion, and selection sort.",
                "topic": "Sorting",
                "difficulty": Difficulty.HARD,
            },
            {
                "question": "What does Big O notation represent?",
                "options": [
                    "Best case time complexity",
                    "Average case time complexity",
                    "Worst case time complexity",
                    "Space complexity only",
                ],
                "correct_answer": 2,
                "explanation": "Big O notation typically represents the upper bound or worst-case time complexity of an algorithm.",
                "topic": "Complexity Analysis",
                "difficulty": Difficulty.MEDIUM,
            },
            {
                "question": "Which algorithm design paradigm does Quick Sort use?",
                "options": ["Greedy", "Dynamic Programming", "Divide and Conquer", "Backtracking"],
                "correct_answer": 2,
                "explanation": "Quick Sort uses Divide and Conquer by partitioning the array and recursively sorting subarrays.",
                "topic": "Sorting",
                "difficulty": Difficulty.HARD,
            },
            {
                "question": "What is the space complexity of recursive Fibonacci implementation?",
                "options": ["O(1)", "O(log n)", "O(n)", "O(2^n)"],
                "correct_answer": 2,
                "explanation": "The recursive call stack can go up to n levels deep, making space complexity O(n).",
                "topic": "Recursion",
                "difficulty": Difficulty.HARD,
            },
        ],
    },
]

KNOWLEDGE_ENTRIES = [
    {
        "topic": "Data Structures",
        "subtopic": "Arrays",
        "content": "Arrays are fundamental data structures that store elements in contiguous memory locations. They provide O(1) access time but require shifting elements for insertions and deletions in the middle. Understanding array operations is crucial for efficient algorithm design.",
        "difficulty": Difficulty.EASY,
        "resources": ["https://www.geeksforgeeks.org/array-data-structure/", "https://www.youtube.com/watch?v=gDqQf4Ekr2A"],
        "tags": ["arrays", "data structures", "fundamentals"],
    },
    {
        "topic": "Data Structures",
        "subtopic": "Linked Lists",
        "content": "Linked lists are dynamic data structures where each element (node) contains data and a reference to the next node. They excel at insertions and deletions but have O(n) access time. Master both singly and doubly linked lists for comprehensive understanding.",
        "difficulty": Difficulty.MEDIUM,
        "resources": ["https://www.geeksforgeeks.org/data-structures/linked-list/", "https://visualgo.net/en/list"],
        "tags": ["linked lists", "data structures", "pointers"],
    },
    {
        "topic": "Data Structures",
        "subtopic": "Stack",
        "content": "Stacks follow LIFO (Last In First Out) principle. Common operations include push, pop, and peek, all with O(1) complexity. Stacks are essential for function call management, expression evaluation, and backtracking algorithms.",
        "difficulty": Difficulty.EASY,
        "resources": ["https://www.geeksforgeeks.org/stack-data-structure/", "https://www.tutorialspoint.com/data_structures_algorithms/stack_algorithm.htm"],
        "tags": ["stack", "data structures", "LIFO"],
    },
    {
        "topic": "Data Structures",
        "subtopic": "Queue",
        "content": "Queues implement FIFO (First In First Out) principle. They support enqueue, dequeue, and front operations. Variations include circular queues, priority queues, and deques. Understanding queues is vital for BFS, scheduling, and buffering.",
        "difficulty": Difficulty.MEDIUM,
        "resources": ["https://www.geeksforgeeks.org/queue-data-structure/", "https://www.programiz.com/dsa/queue"],
        "tags": ["queue", "data structures", "FIFO"],
    },
    {
        "topic": "Algorithms",
        "subtopic": "Searching",
        "content": "Searching algorithms locate specific elements in data structures. Linear search has O(n) complexity while binary search achieves O(log n) on sorted arrays. Understanding search algorithms is fundamental to efficient data retrieval.",
        "difficulty": Difficulty.MEDIUM,
        "resources": ["https://www.geeksforgeeks.org/searching-algorithms/", "https://www.khanacademy.org/computing/computer-science/algorithms"],
        "tags": ["searching", "algorithms", "binary search"],
    },
    {
        "topic": "Algorithms",
        "subtopic": "Sorting",
        "content": "Sorting algorithms arrange data in a specific order. Common algorithms include Bubble Sort (O(n²)), Merge Sort (O(n log n)), and Quick Sort (O(n log n) average). Each has trade-offs between time complexity, space complexity, and stability.",
        "difficulty": Difficulty.HARD,
        "resources": ["https://www.geeksforgeeks.org/sorting-algorithms/", "https://visualgo.net/en/sorting"],
        "tags": ["sorting", "algorithms", "complexity"],
    },
    {
        "topic": "Algorithms",
        "subtopic": "Complexity Analysis",
        "content": "Big O notation describes algorithm efficiency in terms of input size. Common complexities include O(1), O(log n), O(n), O(n log n), and O(n²). Understanding time and space complexity is essential for writing efficient code.",
        "difficulty": Difficulty.MEDIUM,
        "resources": ["https://www.bigocheatsheet.com/", "https://www.youtube.com/watch?v=g2o22C3CRfU"],
        "tags": ["complexity", "big-o", "algorithms"],
    },
    {
        "topic": "Algorithms",
        "subtopic": "Recursion",
        "content": "Recursion involves functions calling themselves to solve problems by breaking them into smaller subproblems. Key concepts include base cases, recursive cases, and call stack management. Recursion is powerful but requires careful consideration of space complexity.",
        "difficulty": Difficulty.HARD,
        "resources": ["https://www.geeksforgeeks.org/recursion/", "https://www.khanacademy.org/computing/computer-science/algorithms/recursive-algorithms"],
        "tags": ["recursion", "algorithms", "divide-and-conquer"],
    },
]


def upsert_user(db: Session, email: str, name: str, role: Role, password: str = DEMO_PASSWORD) -> User:
    user = db.scalar(select(User).where(User.email == email))
    if not user:
        user = User(email=email, name=name, role=role, password_hash=hash_password(password))
        db.add(user); db.flush()
        logger.info(f"User created: {email}")
    return user


def seed(db: Session) -> dict:
    users = {u["role"]: upsert_user(db, **u) for u in USERS}
    instructor = users[Role.INSTRUCTOR]
    created_quizzes = 0
    for data in QUIZZES:
        if db.scalar(select(Quiz).where(Quiz.title == data["title"])):
            continue
        questions = [Question(**q) for q in data["questions"]]
        fields = {k: v for k, v in data.items() if k != "questions"}
        db.add(Quiz(**fields, instructor_id=instructor.id, is_published=True, questions=questions))
        created_quizzes += 1
        logger.info(f"Quiz created: {data['title']}")
    created_entries = 0
    for entry in KNOWLEDGE_ENTRIES:
        if db.scalar(select(KnowledgeBase).where(KnowledgeBase.subtopic == entry["subtopic"])):
            continue
        db.add(KnowledgeBase(**entry))
        created_entries += 1
    db.commit()
    logger.info(f"Created {created_entries} knowledge base entries")
    return {"users": len(users), "quizzes": created_quizzes, "knowledge_entries": created_entries}


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    except Exception:
        db.rollback()
        logger.exception("Error seeding database")
        raise
    finally:
        db.close()
    logger.info("Database seeded successfully")
    for u in USERS:
        logger.info(f"{u['role'].value.title():<11} {u['email']} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    main()
