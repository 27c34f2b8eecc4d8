"""Compiled-in string templates for backend files that have no registry role."""
from typing import Dict, List

import yaml

from initializr.generators.backend_gen.stores import COMPOSE_SERVICES, store_for
from initializr.schemas.project import ProjectConfig


def render_domain_model(config: ProjectConfig) -> str:
    """Generate internal/domain/model.go content.

    Struct tags follow the selected drivers: gorm tags for GORM, db tags for
    sqlx and bson tags for the MongoDB driver.
    """
    gorm = config.has_driver("gorm")
    sqlx = config.has_driver("sqlx")
    bson = config.has_driver("mongo-driver")

    def tag(json_name: str, gorm_tag: str = "", bson_name: str = "") -> str:
        parts = [f'json:"{json_name}"']
        if gorm and gorm_tag:
            parts.append(f'gorm:"{gorm_tag}"')
        if sqlx:
            parts.append(f'db:"{json_name}"')
        if bson:
            parts.append(f'bson:"{bson_name or json_name}"')
        return "`" + " ".join(parts) + "`"

    fields = [
        ("ID", "uint", tag("id", "primaryKey", "_id")),
        ("Name", "string", tag("name", "size:255;not null")),
        ("Email", "string", tag("email", "size:255;uniqueIndex;not null")),
        ("CreatedAt", "time.Time", tag("created_at", "autoCreateTime")),
        ("UpdatedAt", "time.Time", tag("updated_at", "autoUpdateTime")),
    ]
    lines = [f"\t{name:<9} {go_type:<9} {tags}" for name, go_type, tags in fields]

    return """package domain

import (
	"errors"
	"time"
)

var (
	ErrNotFound     = errors.New("not found")
	ErrInvalidInput = errors.New("invalid input")
)

// User is the example entity wired through every layer.
type User struct {
""" + "\n".join(lines) + """
}
"""


def render_service(config: ProjectConfig, memory_repository: bool) -> str:
    """Generate internal/service/service.go content."""
    module = config.project_name
    imports = ['"context"']
    if memory_repository:
        imports.append('"sort"')
    imports += ['"strings"']
    if memory_repository:
        imports.append('"sync"')
    imports.append('"time"')
    import_block = "\n".join(f"\t{line}" for line in imports)

    content = f"""package service

import (
{import_block}

	"{module}/internal/domain"
)

// Repository is implemented by every storage layer.
type Repository interface {{
	CreateUser(ctx context.Context, user *domain.User) error
	GetUserByID(ctx context.Context, id uint) (*domain.User, error)
	ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error)
	DeleteUser(ctx context.Context, id uint) error
}}

type Service struct {{
	repo Repository
}}

func New(repo Repository) *Service {{
	return &Service{{repo: repo}}
}}

func (s *Service) CreateUser(ctx context.Context, name, email string) (*domain.User, error) {{
	name = strings.TrimSpace(name)
	email = strings.TrimSpace(email)
	if name == "" || !strings.Contains(email, "@") {{
		return nil, domain.ErrInvalidInput
	}}
	now := time.Now().UTC()
	user := &domain.User{{Name: name, Email: email, CreatedAt: now, UpdatedAt: now}}
	if err := s.repo.CreateUser(ctx, user); err != nil {{
		return nil, err
	}}
	return user, nil
}}

func (s *Service) GetUser(ctx context.Context, id uint) (*domain.User, error) {{
	return s.repo.GetUserByID(ctx, id)
}}

func (s *Service) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {{
	if limit <= 0 || limit > 100 {{
		limit = 20
	}}
	if offset < 0 {{
		offset = 0
	}}
	return s.repo.ListUsers(ctx, limit, offset)
}}

func (s *Service) DeleteUser(ctx context.Context, id uint) error {{
	return s.repo.DeleteUser(ctx, id)
}}
"""
    if not memory_repository:
        return content

    return content + """
// MemoryRepository keeps users in process memory until a database is configured.
type MemoryRepository struct {
	mu     sync.RWMutex
	nextID uint
	users  map[uint]domain.User
}

func NewMemoryRepository() *MemoryRepository {
	return &MemoryRepository{users: make(map[uint]domain.User)}
}

func (r *MemoryRepository) CreateUser(ctx context.Context, user *domain.User) error {
	r.mu.Lock()
	defer r.mu.Unlock()
	for _, existing := range r.users {
		if existing.Email == user.Email {
			return domain.ErrInvalidInput
		}
	}
	r.nextID++
	user.ID = r.nextID
	r.users[user.ID] = *user
	return nil
}

func (r *MemoryRepository) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {
	r.mu.RLock()
	defer r.mu.RUnlock()
	user, ok := r.users[id]
	if !ok {
		return nil, domain.ErrNotFound
	}
	return &user, nil
}

func (r *MemoryRepository) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {
	r.mu.RLock()
	defer r.mu.RUnlock()
	users := make([]domain.User, 0, len(r.users))
	for _, user := range r.users {
		users = append(users, user)
	}
	sort.Slice(users, func(i, j int) bool { return users[i].ID < users[j].ID })
	if offset >= len(users) {
		return []domain.User{}, nil
	}
	end := offset + limit
	if end > len(users) {
		end = len(users)
	}
	return users[offset:end], nil
}

func (r *MemoryRepository) DeleteUser(ctx context.Context, id uint) error {
	r.mu.Lock()
	defer r.mu.Unlock()
	if _, ok := r.users[id]; !ok {
		return domain.ErrNotFound
	}
	delete(r.users, id)
	return nil
}
"""


def _handler_common(module: str, imports: List[str]) -> str:
    import_block = "\n".join(f"\t{line}" if line else "" for line in imports)
    return f"""package handler

import (
{import_block}

	"{module}/internal/domain"
	"{module}/internal/service"
)

type Handler struct {{
	svc *service.Service
}}

func New(svc *service.Service) *Handler {{
	return &Handler{{svc: svc}}
}}

type createUserRequest struct {{
	Name  string `json:"name"`
	Email string `json:"email"`
}}

func statusFor(err error) int {{
	switch {{
	case errors.Is(err, domain.ErrNotFound):
		return http.StatusNotFound
	case errors.Is(err, domain.ErrInvalidInput):
		return http.StatusBadRequest
	default:
		return http.StatusInternalServerError
	}}
}}

func parseID(raw string) (uint, error) {{
	id, err := strconv.ParseUint(raw, 10, 64)
	if err != nil {{
		return 0, domain.ErrInvalidInput
	}}
	return uint(id), nil
}}
"""


_GIN_HANDLERS = """
func (h *Handler) Register(r *gin.Engine) {
	r.GET("/health", h.health)
	api := r.Group("/api/v1")
	api.GET("/users", h.listUsers)
	api.POST("/users", h.createUser)
	api.GET("/users/:id", h.getUser)
	api.DELETE("/users/:id", h.deleteUser)
}

func (h *Handler) health(c *gin.Context) {
	c.JSON(http.StatusOK, gin.H{"status": "ok"})
}

func (h *Handler) listUsers(c *gin.Context) {
	limit, _ := strconv.Atoi(c.DefaultQuery("limit", "20"))
	offset, _ := strconv.Atoi(c.DefaultQuery("offset", "0"))
	users, err := h.svc.ListUsers(c.Request.Context(), limit, offset)
	if err != nil {
		c.JSON(statusFor(err), gin.H{"error": err.Error()})
		return
	}
	c.JSON(http.StatusOK, users)
}

func (h *Handler) createUser(c *gin.Context) {
	var req createUserRequest
	if err := c.ShouldBindJSON(&req); err != nil {
		c.JSON(http.StatusBadRequest, gin.H{"error": err.Error()})
		return
	}
	user, err := h.svc.CreateUser(c.Request.Context(), req.Name, req.Email)
	if err != nil {
		c.JSON(statusFor(err), gin.H{"error": err.Error()})
		return
	}
	c.JSON(http.StatusCreated, user)
}

func (h *Handler) getUser(c *gin.Context) {
	id, err := parseID(c.Param("id"))
	if err != nil {
		c.JSON(statusFor(err), gin.H{"error": err.Error()})
		return
	}
	user, err := h.svc.GetUser(c.Request.Context(), id)
	if err != nil {
		c.JSON(statusFor(err), gin.H{"error": err.Error()})
		return
	}
	c.JSON(http.StatusOK, user)
}

func (h *Handler) deleteUser(c *gin.Context) {
	id, err := parseID(c.Param("id"))
	if err != nil {
		c.JSON(statusFor(err), gin.H{"error": err.Error()})
		return
	}
	if err := h.svc.DeleteUser(c.Request.Context(), id); err != nil {
		c.JSON(statusFor(err), gin.H{"error": err.Error()})
		return
	}
	c.Status(http.StatusNoContent)
}
"""

_ECHO_HANDLERS = """
func (h *Handler) Register(e *echo.Echo) {
	e.GET("/health", h.health)
	api := e.Group("/api/v1")
	api.GET("/users", h.listUsers)
	api.POST("/users", h.createUser)
	api.GET("/users/:id", h.getUser)
	api.DELETE("/users/:id", h.deleteUser)
}

func fail(err error) error {
	return echo.NewHTTPError(statusFor(err), err.Error())
}

func (h *Handler) health(c echo.Context) error {
	return c.JSON(http.StatusOK, map[string]string{"status": "ok"})
}

func (h *Handler) listUsers(c echo.Context) error {
	limit, _ := strconv.Atoi(c.QueryParam("limit"))
	offset, _ := strconv.Atoi(c.QueryParam("offset"))
	users, err := h.svc.ListUsers(c.Request().Context(), limit, offset)
	if err != nil {
		return fail(err)
	}
	return c.JSON(http.StatusOK, users)
}

func (h *Handler) createUser(c echo.Context) error {
	var req createUserRequest
	if err := c.Bind(&req); err != nil {
		return echo.NewHTTPError(http.StatusBadRequest, err.Error())
	}
	user, err := h.svc.CreateUser(c.Request().Context(), req.Name, req.Email)
	if err != nil {
		return fail(err)
	}
	return c.JSON(http.StatusCreated, user)
}

func (h *Handler) getUser(c echo.Context) error {
	id, err := parseID(c.Param("id"))
	if err != nil {
		return fail(err)
	}
	user, err := h.svc.GetUser(c.Request().Context(), id)
	if err != nil {
		return fail(err)
	}
	return c.JSON(http.StatusOK, user)
}

func (h *Handler) deleteUser(c echo.Context) error {
	id, err := parseID(c.Param("id"))
	if err != nil {
		return fail(err)
	}
	if err := h.svc.DeleteUser(c.Request().Context(), id); err != nil {
		return fail(err)
	}
	return c.NoContent(http.StatusNoContent)
}
"""

_FIBER_HANDLERS = """
func (h *Handler) Register(app *fiber.App) {
	app.Get("/health", h.health)
	api := app.Group("/api/v1")
	api.Get("/users", h.listUsers)
	api.Post("/users", h.createUser)
	api.Get("/users/:id", h.getUser)
	api.Delete("/users/:id", h.deleteUser)
}

func fail(err error) error {
	return fiber.NewError(statusFor(err), err.Error())
}

func (h *Handler) health(c *fiber.Ctx) error {
	return c.JSON(fiber.Map{"status": "ok"})
}

func (h *Handler) listUsers(c *fiber.Ctx) error {
	limit, _ := strconv.Atoi(c.Query("limit", "20"))
	offset, _ := strconv.Atoi(c.Query("offset", "0"))
	users, err := h.svc.ListUsers(c.UserContext(), limit, offset)
	if err != nil {
		return fail(err)
	}
	return c.JSON(users)
}

func (h *Handler) createUser(c *fiber.Ctx) error {
	var req createUserRequest
	if err := c.BodyParser(&req); err != nil {
		return fiber.NewError(http.StatusBadRequest, err.Error())
	}
	user, err := h.svc.CreateUser(c.UserContext(), req.Name, req.Email)
	if err != nil {
		return fail(err)
	}
	return c.Status(http.StatusCreated).JSON(user)
}

func (h *Handler) getUser(c *fiber.Ctx) error {
	id, err := parseID(c.Params("id"))
	if err != nil {
		return fail(err)
	}
	user, err := h.svc.GetUser(c.UserContext(), id)
	if err != nil {
		return fail(err)
	}
	return c.JSON(user)
}

func (h *Handler) deleteUser(c *fiber.Ctx) error {
	id, err := parseID(c.Params("id"))
	if err != nil {
		return fail(err)
	}
	if err := h.svc.DeleteUser(c.UserContext(), id); err != nil {
		return fail(err)
	}
	return c.SendStatus(http.StatusNoContent)
}
"""

# Shared by chi and net/http, which both use plain http.HandlerFunc values.
_STDLIB_HANDLERS = """
func writeJSON(w http.ResponseWriter, status int, body any) {
	w.Header().Set("Content-Type", "application/json")
	w.WriteHeader(status)
	json.NewEncoder(w).Encode(body)
}

func writeError(w http.ResponseWriter, err error) {
	writeJSON(w, statusFor(err), map[string]string{"error": err.Error()})
}

func (h *Handler) health(w http.ResponseWriter, r *http.Request) {
	writeJSON(w, http.StatusOK, map[string]string{"status": "ok"})
}

func (h *Handler) listUsers(w http.ResponseWriter, r *http.Request) {
	limit, _ := strconv.Atoi(r.URL.Query().Get("limit"))
	offset, _ := strconv.Atoi(r.URL.Query().Get("offset"))
	users, err := h.svc.ListUsers(r.Context(), limit, offset)
	if err != nil {
		writeError(w, err)
		return
	}
	writeJSON(w, http.StatusOK, users)
}

func (h *Handler) createUser(w http.ResponseWriter, r *http.Request) {
	var req createUserRequest
	if err := json.NewDecoder(r.Body).Decode(&req); err != nil {
		writeJSON(w, http.StatusBadRequest, map[string]string{"error": err.Error()})
		return
	}
	user, err := h.svc.CreateUser(r.Context(), req.Name, req.Email)
	if err != nil {
		writeError(w, err)
		return
	}
	writeJSON(w, http.StatusCreated, user)
}

func (h *Handler) getUser(w http.ResponseWriter, r *http.Request, rawID string) {
	id, err := parseID(rawID)
	if err != nil {
		writeError(w, err)
		return
	}
	user, err := h.svc.GetUser(r.Context(), id)
	if err != nil {
		writeError(w, err)
		return
	}
	writeJSON(w, http.StatusOK, user)
}

func (h *Handler) deleteUser(w http.ResponseWriter, r *http.Request, rawID string) {
	id, err := parseID(rawID)
	if err != nil {
		writeError(w, err)
		return
	}
	if err := h.svc.DeleteUser(r.Context(), id); err != nil {
		writeError(w, err)
		return
	}
	w.WriteHeader(http.StatusNoContent)
}
"""

_CHI_ROUTES = """
func (h *Handler) Register(r chi.Router) {
	r.Get("/health", h.health)
	r.Route("/api/v1/users", func(r chi.Router) {
		r.Get("/", h.listUsers)
		r.Post("/", h.createUser)
		r.Get("/{id}", func(w http.ResponseWriter, req *http.Request) {
			h.getUser(w, req, chi.URLParam(req, "id"))
		})
		r.Delete("/{id}", func(w http.ResponseWriter, req *http.Request) {
			h.deleteUser(w, req, chi.URLParam(req, "id"))
		})
	})
}
"""

_NET_HTTP_ROUTES = """
func (h *Handler) Register(mux *http.ServeMux) {
	mux.HandleFunc("/health", h.health)
	mux.HandleFunc("/api/v1/users", func(w http.ResponseWriter, r *http.Request) {
		switch r.Method {
		case http.MethodGet:
			h.listUsers(w, r)
		case http.MethodPost:
			h.createUser(w, r)
		default:
			w.WriteHeader(http.StatusMethodNotAllowed)
		}
	})
	mux.HandleFunc("/api/v1/users/", func(w http.ResponseWriter, r *http.Request) {
		rawID := strings.TrimPrefix(r.URL.Path, "/api/v1/users/")
		switch r.Method {
		case http.MethodGet:
			h.getUser(w, r, rawID)
		case http.MethodDelete:
			h.deleteUser(w, r, rawID)
		default:
			w.WriteHeader(http.StatusMethodNotAllowed)
		}
	})
}
"""

_HANDLER_VARIANTS: Dict[str, tuple] = {
    "gin": (['"errors"', '"net/http"', '"strconv"', "", '"github.com/gin-gonic/gin"'], _GIN_HANDLERS),
    "echo": (['"errors"', '"net/http"', '"strconv"', "", '"github.com/labstack/echo/v4"'], _ECHO_HANDLERS),
    "fiber": (['"errors"', '"net/http"', '"strconv"', "", '"github.com/gofiber/fiber/v2"'], _FIBER_HANDLERS),
    "chi": (
        ['"encoding/json"', '"errors"', '"net/http"', '"strconv"', "", '"github.com/go-chi/chi/v5"'],
        _CHI_ROUTES + _STDLIB_HANDLERS,
    ),
    "net-http": (
        ['"encoding/json"', '"errors"', '"net/http"', '"strconv"', '"strings"'],
        _NET_HTTP_ROUTES + _STDLIB_HANDLERS,
    ),
}


def render_handler(config: ProjectConfig) -> str:
    """Generate internal/handler/handler.go for the selected HTTP framework."""
    http_id = config.http_package.id if config.http_package else "gin"
    imports, body = _HANDLER_VARIANTS.get(http_id, _HANDLER_VARIANTS["gin"])
    return _handler_common(config.project_name, imports) + body


def _needs_cgo(config: ProjectConfig) -> bool:
    # mattn/go-sqlite3 and the GORM sqlite dialector both link against libsqlite3
    return any(s.database.id == "sqlite" and s.driver is not None for s in config.databases)


def render_dockerfile(config: ProjectConfig) -> str:
    """Generate Dockerfile content."""
    name = config.project_name
    if _needs_cgo(config):
        toolchain = "RUN apk add --no-cache build-base\n"
        cgo = "1"
    else:
        toolchain = ""
        cgo = "0"
    return f"""FROM golang:{config.language_version}-alpine AS build

WORKDIR /src
{toolchain}
COPY . .
RUN go mod tidy && CGO_ENABLED={cgo} go build -o /out/{name} ./cmd/{name}

FROM alpine:3.20

RUN apk add --no-cache ca-certificates
COPY --from=build /out/{name} /usr/local/bin/{name}

ENV PORT=8080
EXPOSE 8080

CMD ["{name}"]
"""


def render_docker_compose(config: ProjectConfig) -> str:
    """Generate docker-compose.yml with one service per selected database."""
    name = config.project_name
    environment = {"PORT": "8080", "APP_ENV": "production"}
    services: Dict[str, dict] = {}
    volumes: Dict[str, dict] = {}
    depends_on: List[str] = []

    for selection in config.databases:
        store = store_for(selection.database.id)
        environment[store.env] = store.container_dsn(name)
        compose = COMPOSE_SERVICES.get(store.id)
        if not store.compose_service or compose is None or store.compose_service in services:
            continue
        volume = f"{store.compose_service}_data"
        service = {
            "image": compose.image,
            "ports": [f"{compose.port}:{compose.port}"],
            "volumes": [f"{volume}:{compose.volume_path}"],
        }
        if compose.environment:
            service["environment"] = {key: value.format(name=name) for key, value in compose.environment.items()}
        if compose.healthcheck:
            service["healthcheck"] = {
                "test": list(compose.healthcheck),
                "interval": "5s",
                "timeout": "5s",
                "retries": 5,
            }
        services[store.compose_service] = service
        volumes[volume] = {}
        depends_on.append(store.compose_service)

    app = {"build": ".", "ports": ["8080:8080"], "environment": environment}
    if depends_on:
        app["depends_on"] = depends_on

    document = {"services": {"app": app, **services}}
    if volumes:
        document["volumes"] = volumes
    return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)


def render_gitignore() -> str:
    """Generate .gitignore content."""
    return """# Binaries
bin/
tmp/
*.exe
*.test
*.out

# Local state
.env
*.db
coverage.html

# Editors
.idea/
.vscode/
.DS_Store
"""


def render_makefile(config: ProjectConfig) -> str:
    """Generate Makefile content."""
    name = config.project_name
    phony = ["run", "build", "test", "tidy", "clean"]
    targets = [
        f"run:\n\tgo run ./cmd/{name}",
        f"build:\n\tgo build -o bin/{name} ./cmd/{name}",
        "test:\n\tgo test ./...",
        "tidy:\n\tgo mod tidy",
        "clean:\n\trm -rf bin tmp",
    ]
    if config.has_feature("air"):
        phony.append("dev")
        targets.append("dev:\n\tair -c .air.toml")
    if config.has_feature("docker"):
        phony += ["docker-up", "docker-down"]
        targets.append("docker-up:\n\tdocker compose up --build")
        targets.append("docker-down:\n\tdocker compose down")
    return f".PHONY: {' '.join(phony)}\n\n" + "\n\n".join(targets) + "\n"


def render_env_example(config: ProjectConfig) -> str:
    """Generate .env.example content."""
    lines = ["APP_ENV=development", "PORT=8080", "LOG_LEVEL=info"]
    for selection in config.databases:
        store = store_for(selection.database.id)
        lines.append(f"{store.env}={store.dsn(config.project_name)}")
    return "\n".join(lines) + "\n"


def render_air_toml(config: ProjectConfig) -> str:
    """Generate .air.toml for live reload."""
    name = config.project_name
    return f"""root = "."
tmp_dir = "tmp"

[build]
  cmd = "go build -o ./tmp/{name} ./cmd/{name}"
  bin = "./tmp/{name}"
  include_ext = ["go", "tpl", "tmpl", "html"]
  exclude_dir = ["tmp", "vendor", "bin"]
  delay = 1000
  stop_on_error = true

[log]
  time = false

[misc]
  clean_on_exit = true
"""


def render_logger() -> str:
    """Generate internal/logger/logger.go content."""
    return """package logger

import (
	"log"
	"os"
	"time"

	"github.com/rs/zerolog"
)

// L is the process-wide structured logger.
var L = zerolog.New(os.Stdout).With().Timestamp().Logger()

// Init sets the level and routes the standard library logger through zerolog.
func Init(level string) {
	lvl, err := zerolog.ParseLevel(level)
	if err != nil {
		lvl = zerolog.InfoLevel
	}
	zerolog.TimeFieldFormat = time.RFC3339
	L = L.Level(lvl)
	log.SetFlags(0)
	log.SetOutput(L)
}
"""


def render_testutil(config: ProjectConfig) -> str:
    """Generate internal/testutil/testutil.go content."""
    module = config.project_name
    return f"""package testutil

import (
	"context"
	"sync"

	"{module}/internal/domain"
)

// FakeRepository is an in-memory service.Repository for tests.
type FakeRepository struct {{
	mu     sync.Mutex
	nextID uint
	Users  map[uint]domain.User
}}

func NewFakeRepository() *FakeRepository {{
	return &FakeRepository{{Users: make(map[uint]domain.User)}}
}}

func (r *FakeRepository) CreateUser(ctx context.Context, user *domain.User) error {{
	r.mu.Lock()
	defer r.mu.Unlock()
	r.nextID++
	user.ID = r.nextID
	r.Users[user.ID] = *user
	return nil
}}

func (r *FakeRepository) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {{
	r.mu.Lock()
	defer r.mu.Unlock()
	user, ok := r.Users[id]
	if !ok {{
		return nil, domain.ErrNotFound
	}}
	return &user, nil
}}

func (r *FakeRepository) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {{
	r.mu.Lock()
	defer r.mu.Unlock()
	users := []domain.User{{}}
	for id := uint(1); id <= r.nextID; id++ {{
		if user, ok := r.Users[id]; ok {{
			users = append(users, user)
		}}
	}}
	if offset >= len(users) {{
		return []domain.User{{}}, nil
	}}
	end := offset + limit
	if end > len(users) {{
		end = len(users)
	}}
	return users[offset:end], nil
}}

func (r *FakeRepository) DeleteUser(ctx context.Context, id uint) error {{
	r.mu.Lock()
	defer r.mu.Unlock()
	if _, ok := r.Users[id]; !ok {{
		return domain.ErrNotFound
	}}
	delete(r.Users, id)
	return nil
}}
"""


def render_service_test(config: ProjectConfig) -> str:
    """Generate internal/service/service_test.go content."""
    module = config.project_name
    return f"""package service_test

import (
	"context"
	"testing"

	"github.com/stretchr/testify/assert"
	"github.com/stretchr/testify/require"

	"{module}/internal/domain"
	"{module}/internal/service"
	"{module}/internal/testutil"
)

func TestCreateAndGetUser(t *testing.T) {{
	svc := service.New(testutil.NewFakeRepository())
	ctx := context.Background()

	created, err := svc.CreateUser(ctx, "Ada", "ada@example.com")
	require.NoError(t, err)
	assert.NotZero(t, created.ID)

	fetched, err := svc.GetUser(ctx, created.ID)
	require.NoError(t, err)
	assert.Equal(t, "ada@example.com", fetched.Email)
}}

func TestCreateUserRejectsInvalidInput(t *testing.T) {{
	svc := service.New(testutil.NewFakeRepository())

	_, err := svc.CreateUser(context.Background(), " ", "not-an-email")
	assert.ErrorIs(t, err, domain.ErrInvalidInput)
}}

func TestDeleteUnknownUser(t *testing.T) {{
	svc := service.New(testutil.NewFakeRepository())

	err := svc.DeleteUser(context.Background(), 42)
	assert.ErrorIs(t, err, domain.ErrNotFound)
}}

func TestListUsersClampsLimit(t *testing.T) {{
	repo := testutil.NewFakeRepository()
	svc := service.New(repo)
	ctx := context.Background()
	for _, email := range []string{{"a@example.com", "b@example.com", "c@example.com"}} {{
		_, err := svc.CreateUser(ctx, "user", email)
		require.NoError(t, err)
	}}

	users, err := svc.ListUsers(ctx, 0, 0)
	require.NoError(t, err)
	assert.Len(t, users, 3)
}}
"""
