"""Basic usage example: preview a card without sending it."""

from datetime import datetime, timezone

from teams_notifier import CardBuilder, Context


def main():
    context = Context.from_environ({
        "CI_REPO": "acme/widgets",
        "CI_COMMIT_SHA": "4f2a9c81d0e5b7a3",
        "CI_COMMIT_AUTHOR": "octocat",
        "CI_COMMIT_MESSAGE": "Fix flaky integration test\n\nLonger description.",
        "CI_PIPELINE_URL": "https://ci.example.com/acme/widgets/42",
        "CI_PIPELINE_FORGE_URL": "https://git.example.com/acme/widgets/commit/4f2a9c8",
        "DRONE_BUILD_STATUS": "success",
        "PLUGIN_FACTS": "project,version,message",
        "PLUGIN_VARIABLES": "CI_REPO,DRONE_BUILD_STATUS",
    })
    
    builder = CardBuilder(context, now=datetime.now(timezone.utc))
    message = builder.build()
    
    print(f"Version: {builder.version}")
    print(message.model_dump_json(by_alias=True, exclude_none=True, indent=2))


if __name__ == "__main__":
    main()
