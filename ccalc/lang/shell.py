"""Handles interactive/command-line mode for the ccalc interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Complex number calculator shell."""
    intro = "Complex number calculator :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary ccalc line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")  # e.g. 'help = 2' binds a name called help

        print("Welcome to the ccalc interpreter!\n\n"
              "Type an arithmetic expression over complex numbers to evaluate it. Imaginary \n"
              "literals end in 'i' (2i, 0.5i, or just i), and +, -, *, / and parentheses \n"
              "work as usual. abs, arg, norm and conj apply to a parenthesized expression.\n\n"
              "Try it out by typing 'z = 3 + 4i'. This will bind the value 3 + 4i to the \n"
              "name 'z'. Next, try typing 'abs(z)'. This will give '5' as the result.\n\n"
              "Type 'vars' to list every name bound so far.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")
        return True

    def do_vars(self, arg):
        """Lists bound names and their values."""
        if arg:
            return self.default(f"vars {arg}")

        env = self.sess.env
        for name in env.names():
            print(f"{name} = {env.lookup(name)}")
