"""Demo content bundled with storycompass."""
