"""GraphQL documents sent to the Kibela API.

Result shapes relied on by the sync engine:
    LIST_NOTES  -> {"notes": Connection<Note>}
    CREATE_NOTE -> {"createNote": {"note": Note}}
    UPDATE_NOTE -> {"updateNote": {"note": Note}}
"""

NOTE_FIELDS = """
  id
  title
  content
  coediting
  createdAt
  publishedAt
  contentUpdatedAt
  url
  author {
    id
    account
  }
  groups {
    id
    name
  }
  folders(first: 100) {
    edges {
      node {
        id
        name
        group {
          id
        }
      }
    }
  }
"""

LIST_NOTES = """
query ListNotes($first: Int!, $after: String) {
  notes(first: $first, after: $after) {
    edges {
      cursor
      node {%s}
    }
    pageInfo {
      endCursor
      hasNextPage
    }
    totalCount
  }
}
""" % NOTE_FIELDS

CREATE_NOTE = """
mutation CreateNote($input: CreateNoteInput!) {
  createNote(input: $input) {
    note {%s}
  }
}
""" % NOTE_FIELDS

UPDATE_NOTE = """
mutation UpdateNote($input: UpdateNoteInput!) {
  updateNote(input: $input) {
    note {%s}
  }
}
""" % NOTE_FIELDS
