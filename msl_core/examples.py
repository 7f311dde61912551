"""MSL Example Scripts"""

EXAMPLE_SCRIPTS = {
    "open_and_wait": """
        open "https://example.com"
        wait 0
    """,

    "user_gallery": """
        open "https://example.com"
        click ".user-card a"
          set user = text
          media
            image
              where src ~ "cdn.example.com"
              extensions jpg, png
            save to "./media/{user}"
    """,

    "nested_profiles": """
        # Directory -> team page -> member profile
        open "https://example.com/directory"
        click "a.team"
          set team = attr("data-team")
          click "a.member"
            set member = split(" - ").split(",")[0]
            click "a.profile"
              media
                image
                  where alt != ""
                video
                  extensions mp4, webm
        save to "./profiles"
    """,

    "podcast_audio": """
        open "https://podcasts.example.com/latest"
        media
          audio
            where src ~ "/episodes/"
            extensions mp3, ogg
        wait 2
    """,
}
