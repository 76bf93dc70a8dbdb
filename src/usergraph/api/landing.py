"""
Static landing page served at the site root.
"""

LANDING_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>FastAPI + Strawberry GraphQL Server</title>
  <script src="https://cdn.tailwindcss.com"></script>
</head>

<body class="bg-gray-100 h-screen flex items-center justify-center">
  <div class="bg-white shadow-lg rounded-xl p-10 text-center max-w-md">
    <h1 class="text-3xl font-semibold mb-4 text-gray-800">
      GraphQL Server is running
    </h1>

    <p class="text-gray-600 mb-8">
      Click the button below to open the GraphiQL IDE.
    </p>

    <a href="/graphiql"
       class="px-6 py-3 bg-blue-600 hover:bg-blue-700 text-white
              rounded-lg text-lg transition">
      Open GraphiQL
    </a>
  </div>
</body>
</html>
"""
