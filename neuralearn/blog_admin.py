"""Command line admin for the local blog store.

    python -m neuralearn.blog_admin list
    python -m neuralearn.blog_admin create --title T --content C [--excerpt E] [--category Tutorial] [--draft]
    python -m neuralearn.blog_admin delete BLOG_ID
"""
import argparse
import logging
import sys
from typing import List, Optional

from neuralearn.core.config import LOCAL_STORAGE_PATH
from neuralearn.services.blog_store import BlogError, BlogStore, LocalStorage

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="neuralearn.blog_admin", description="Manage locally stored blogs")
    parser.add_argument("--storage", default=LOCAL_STORAGE_PATH, help="path of the local storage file")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="list all blogs")
    create = sub.add_parser("create", help="create a blog")
    create.add_argument("--title", required=True)
    create.add_argument("--content", required=True)
    create.add_argument("--excerpt", default="")
    create.add_argument("--category", default="Tutorial")
    create.add_argument("--draft", action="store_true", help="save unpublished")
    delete = sub.add_parser("delete", help="delete a blog")
    delete.add_argument("blog_id")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    store = BlogStore(LocalStorage(args.storage))
    try:
        if args.command == "list":
            blogs = store.list()
            print(f"All Blogs ({len(blogs)})")
            for b in blogs:
                state = "Published" if b.isPublished else "Draft"
                print(f"{b.id}\t{state}\t{b.category}\t{b.createdAt[:10]}\t{b.title}")
        elif args.command == "create":
            blog = store.create(args.title, args.content, excerpt=args.excerpt, category=args.category,
                                is_published=not args.draft)
            print(f"Blog created successfully! ({blog.id})")
        elif args.command == "delete":
            if store.delete(args.blog_id) == 0:
                print(f"No blog with id {args.blog_id}", file=sys.stderr)
                return 1
            print("Blog deleted successfully!")
    except (BlogError, OSError) as e:
        logger.error(f"Blog {args.command} failed: {e}")
        print(f"Failed to {args.command} blog: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    sys.exit(main())
