"""
Line-oriented console for the blog core.

Prints the post list, post details and navigation the way the web front end
lays them out, and turns typed commands into BlogContext operations.
"""

import logging
import shlex
from typing import Callable, List, Optional

from logic.blog_context import BlogContext, COMMENTS_HEADER, CREATE_POST_HEADER, SITE_TITLE
from models.content import Post


logger = logging.getLogger(__name__)


HELP_TEXT = """Commands:
  posts                 List posts, newest first
  view N                Show post N with its comments
  login                 Log in
  logout                Log out
  post                  Create a post (logged in only)
  comment N TEXT        Add a comment to post N
  help                  Show this help
  quit                  Exit"""


class BlogConsole:
    """
    Interactive console bound to one BlogContext.

    Input and output are injectable so the console can be driven from tests.
    """

    def __init__(
        self,
        context: BlogContext,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        password_func: Optional[Callable[[str], str]] = None
    ):
        self.context = context
        self.input = input_func
        self.output = output
        self.password_input = password_func or input_func
        self.running = False

    def run(self) -> None:
        """Read commands until ``quit`` or end of input."""
        self.running = True
        self.output(SITE_TITLE)
        self.show_navigation()

        while self.running:
            try:
                line = self.input("> ")
            except EOFError:
                break
            self.handle(line)

    def handle(self, line: str) -> None:
        """Dispatch a single command line."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.output(f"Could not parse command: {e}")
            return

        if not parts:
            return

        command, args = parts[0].lower(), parts[1:]
        handler = getattr(self, f"cmd_{command}", None)
        if handler is None:
            self.output(f"Unknown command '{command}'. Type 'help' for a list.")
            return

        handler(args)

    # Rendering

    def show_navigation(self) -> None:
        self.output(" | ".join(self.context.view.visible_actions()))

    def show_error(self) -> None:
        if self.context.error_message:
            self.output(f"Error: {self.context.error_message}")

    def render_post_list(self, posts: List[Post]) -> None:
        if not posts:
            self.output("No posts yet.")
            return
        for index, post in enumerate(posts, start=1):
            self.output(f"[{index}] {post.title}")

    def render_post(self, post: Post) -> None:
        self.output(post.title)
        self.output(post.content)
        self.output("")
        self.output(COMMENTS_HEADER)
        for comment in post.comments:
            self.output(f"  {comment.render()}")

    # Commands

    def cmd_help(self, args: List[str]) -> None:
        self.output(HELP_TEXT)

    def cmd_quit(self, args: List[str]) -> None:
        self.running = False

    def cmd_posts(self, args: List[str]) -> None:
        self.render_post_list(self.context.list_posts())

    def cmd_view(self, args: List[str]) -> None:
        post = self._post_from_args(args)
        if post is not None:
            self.render_post(post)

    def cmd_login(self, args: List[str]) -> None:
        username = self.input("Username: ")
        password = self.password_input("Password: ")

        if self.context.login(username, password) is None:
            self.show_error()
            return

        self.output(f"Logged in as {self.context.session.user}")
        self.show_navigation()

    def cmd_logout(self, args: List[str]) -> None:
        self.context.logout()
        self.output("Logged out")
        self.show_navigation()

    def cmd_post(self, args: List[str]) -> None:
        if not self.context.capabilities.show_create_post:
            self.output("Log in to create a post.")
            return

        self.output(CREATE_POST_HEADER)
        title = self.input("Title: ")
        content = self.input("Content: ")

        post = self.context.create_post(title, content)
        if post is None:
            self.show_error()
            return

        self.output(f"Created '{post.title}'")
        self.render_post_list(self.context.list_posts())

    def cmd_comment(self, args: List[str]) -> None:
        post = self._post_from_args(args[:1])
        if post is None:
            return

        text = " ".join(args[1:])
        author = self.context.session.user
        if self.context.add_comment(post.id, text, author=author) is None:
            self.show_error()
            return

        self.render_post(self.context.get_post(post.id))

    def _post_from_args(self, args: List[str]) -> Optional[Post]:
        if not args:
            self.output("Give a post number, see 'posts'.")
            return None

        try:
            index = int(args[0])
        except ValueError:
            self.output(f"'{args[0]}' is not a post number.")
            return None

        posts = self.context.list_posts()
        if index < 1 or index > len(posts):
            self.output(f"There is no post {index}.")
            return None

        return posts[index - 1]
