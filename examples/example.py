import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv
load_dotenv()

from e2e2d import (
    comment,
    fill,
    input_value,
    left_click,
    nav_to,
    pre_condition,
    run,
    see,
    should,
)

BASE_URL = os.getenv("E2E2D_BASE_URL", "https://www.selenium.dev/selenium/web/web-form.html")

open_form = pre_condition("Open the web form", nav_to(BASE_URL))


def main():
    # Reads the configuration from the command line, e.g.
    #   python examples/example.py --headless -o docs
    run(
        "Fill in the web form",
        "Types a name into the text input and submits the form.",
        open_form,
        comment("The form is opened by the precondition above."),
        fill("#my-text-id", "Ada", doc="Enter the name"),
        should(see("#my-text-id", "the text input")).equal("Ada", input_value),
        left_click("button[type=submit]", doc="Submit the form"),
        should(see("#message")).to().exist(),
    )


if __name__ == "__main__":
    main()
