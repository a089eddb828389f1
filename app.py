"""
Flowchart.ai

Describe a process and get a Mermaid flowchart back, then refine it with
follow-up requests. Development version - sources directly from the local
flowchartbot folder.
"""

from shiny import run_app

from flowchartbot import flowchartbot_app

# Create the app instance for development
app = flowchartbot_app(
    debug=True,  # Enable debug mode for development
)

if __name__ == "__main__":
    run_app(app, launch_browser=True, port=0)
