from slidescramble.main import app

app(prog_name="slide-scramble")
